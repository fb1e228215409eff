"""Contract tests: the fluent handles satisfy their structural protocols."""
