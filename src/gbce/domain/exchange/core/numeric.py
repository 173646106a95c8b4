"""Floating point helpers for the exchange ratios."""

import math


def ieee_divide(numerator: float, denominator: float) -> float:
    r"""Divide two floats with IEEE-754 semantics for a zero denominator.

    Python raises ZeroDivisionError on ``x / 0.0``. Ratios such as the P/E
    of a stock paying no dividend are instead defined to be infinite, so a
    zero denominator is resolved the way hardware division would:

    $$\frac{x}{\pm 0} = \begin{cases} \pm\infty & x \neq 0 \\
    \text{NaN} & x = 0 \end{cases}$$

    Parameters
    ----------
    numerator : float
        The dividend of the division.
    denominator : float
        The divisor of the division.

    Returns
    -------
    float
        ``numerator / denominator``, or ``inf``/``-inf``/``nan`` when the
        denominator is zero.

    Examples
    --------
    >>> ieee_divide(10.0, 4.0)
    2.5
    >>> ieee_divide(10.0, 0.0)
    inf
    >>> math.isnan(ieee_divide(0.0, 0.0))
    True
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator
