"""
Constant Series
Arbitrary-precision fixed-point evaluators for the registered constants

Every evaluator takes a bit count P and returns (x, err) such that
|x - C * 2**P| <= err, using only Python integers.
"""

import math

from .errors import UnknownConstantError

# Chudnovsky series parameters
CHUDNOVSKY_A = 13591409
CHUDNOVSKY_B = 545140134
CHUDNOVSKY_C3_OVER_24 = 640320 ** 3 // 24

# Each Chudnovsky term contributes log2(640320**3 / 1728) ~ 47.11 bits
CHUDNOVSKY_BITS_PER_TERM = 47


def _chudnovsky_split(a, b):
    """
    Binary splitting for the Chudnovsky series.

    Returns P(a, b), Q(a, b), T(a, b) such that
    pi = 426880 * sqrt(10005) * Q(0, N) / T(0, N)
    """
    if b - a == 1:
        if a == 0:
            return 1, 1, CHUDNOVSKY_A

        k = a
        p = (6 * k - 5) * (2 * k - 1) * (6 * k - 1)
        q = k * k * k * CHUDNOVSKY_C3_OVER_24
        t = (CHUDNOVSKY_A + CHUDNOVSKY_B * k) * p
        if k % 2 == 1:
            t = -t
        return p, q, t

    m = (a + b) // 2
    p1, q1, t1 = _chudnovsky_split(a, m)
    p2, q2, t2 = _chudnovsky_split(m, b)
    return p1 * p2, q1 * q2, q2 * t1 + p1 * t2


def pi_fixed(bits):
    """pi * 2**bits via Chudnovsky + binary splitting."""
    terms = bits // CHUDNOVSKY_BITS_PER_TERM + 2
    _p, q, t = _chudnovsky_split(0, terms)
    sqrt_10005 = math.isqrt(10005 << (2 * bits))
    return (q * 426880 * sqrt_10005) // t, 4


def _factorial_split(a, b):
    """
    Binary splitting for sum_{k=a+1}^{b} 1 / ((a+1)(a+2)...k).

    Returns (p, q) with the sum equal to p / q and q = (a+1)...b.
    """
    if b - a == 1:
        return 1, b

    m = (a + b) // 2
    p1, q1 = _factorial_split(a, m)
    p2, q2 = _factorial_split(m, b)
    return p1 * q2 + p2, q1 * q2


def e_fixed(bits):
    """e * 2**bits via the factorial series sum 1/k!."""
    # Tail after N terms is below 2/(N+1)!, so stop once log2(N!) clears the precision
    terms = 1
    log2_factorial = 0.0
    while log2_factorial < bits + 8:
        terms += 1
        log2_factorial += math.log2(terms)

    p, q = _factorial_split(0, terms)
    return (1 << bits) + (p << bits) // q, 2


def phi_fixed(bits):
    """Golden ratio (1 + sqrt(5)) / 2 * 2**bits."""
    return ((1 << bits) + math.isqrt(5 << (2 * bits))) >> 1, 2


def sqrt2_fixed(bits):
    """sqrt(2) * 2**bits."""
    return math.isqrt(2 << (2 * bits)), 1


def _atanh_inverse(n, bits):
    """
    atanh(1/n) * 2**bits as a floored fixed-point series.

    Returns (total, terms); total is low by at most terms + 1 units.
    """
    power = (1 << bits) // n
    n_squared = n * n
    total = 0
    k = 0
    while power:
        total += power // (2 * k + 1)
        power //= n_squared
        k += 1
    return total, k


def ln2_fixed(bits):
    """ln(2) * 2**bits via 2 * atanh(1/3)."""
    guard = bits.bit_length() + 4
    total, _terms = _atanh_inverse(3, bits + guard)
    return (2 * total) >> guard, 2


# Registered constants in declaration order: name -> fixed-point evaluator
CONSTANT_REGISTRY = {
    'pi': pi_fixed,
    'e': e_fixed,
    'phi': phi_fixed,
    'sqrt2': sqrt2_fixed,
    'ln2': ln2_fixed,
}


def known_constants():
    """Names of all registered constants, in declaration order."""
    return list(CONSTANT_REGISTRY)


def validate_constant(name, operation=None):
    """
    Check that a constant name is registered.

    Args:
        name: Constant name (e.g. 'pi')
        operation: Name of the calling operation (for error context)

    Returns:
        str: The validated name

    Raises:
        UnknownConstantError: If name is not registered
    """
    if not isinstance(name, str) or name not in CONSTANT_REGISTRY:
        raise UnknownConstantError(name, operation, known_constants())
    return name


def fixed_point(name, bits):
    """
    Evaluate a registered constant as a fixed-point integer.

    Args:
        name: Constant name
        bits: Fractional bits of precision

    Returns:
        tuple: (x, err) with |x - C * 2**bits| <= err
    """
    validate_constant(name, "fixed_point")
    return CONSTANT_REGISTRY[name](bits)
