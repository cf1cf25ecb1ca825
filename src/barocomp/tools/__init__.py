"""Development helpers.

:mod:`debug` holds the opt-in timing hooks enabled by ``BAROCOMP_DEBUG``,
and :mod:`vectors` generates raw ADC test vectors from published readings.
"""
