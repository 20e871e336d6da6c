"""Run diagnostics writers."""
