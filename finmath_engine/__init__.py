"""
Financial Mathematics Engine

Stateless calculation modules:
- rates: nominal / effective / discount / force-of-interest conversions
- cashflows: present and accumulated value of cashflow sequences
- annuities: level, due, continuous and varying annuities
- loans: level-payment amortization + outstanding balance
- bonds: price, book-value schedule, dirty/clean split
- risk: Macaulay/modified duration and convexity, DV01
- curves: discount factors, forwards, par yield from spot rates
- immunization: Redington conditions
- swaps: par swap rate + mark-to-market
- rootfinding: Newton-Raphson IRR
- calculators: compute-request entry points for the presentation layer
- config: settings (tolerances, display precision) + logging setup

Numeric domain errors come back as inf/nan, never as exceptions.
"""
