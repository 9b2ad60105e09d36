"""Search orchestration: one module per endpoint plus shared aggregation helpers."""
