"""Store layer.

This package is the only place a store's triple is replaced: the
propagation pipeline in :mod:`pytriple.state.store` and the single-slot
async coordinator in :mod:`pytriple.state.execution` that feeds it.
"""
