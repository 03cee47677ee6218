from transfertpro.core.nonce import NonceGenerator


def test_next_returns_clock_value_when_clock_advances() -> None:
    ticks = iter([100, 200, 300])
    nonces = NonceGenerator(clock=lambda: next(ticks))

    assert [nonces.next(), nonces.next(), nonces.next()] == [100, 200, 300]


def test_next_bumps_value_when_clock_does_not_advance() -> None:
    nonces = NonceGenerator(clock=lambda: 1_000)

    assert [nonces.next(), nonces.next(), nonces.next()] == [1_000, 1_001, 1_002]


def test_next_never_goes_backwards_when_clock_does() -> None:
    ticks = iter([500, 100, 600])
    nonces = NonceGenerator(clock=lambda: next(ticks))

    assert [nonces.next(), nonces.next(), nonces.next()] == [500, 501, 600]


def test_next_values_are_unique_with_real_clock() -> None:
    nonces = NonceGenerator()

    values = [nonces.next() for _ in range(1_000)]

    assert len(set(values)) == len(values)
    assert values == sorted(values)
