"""Benchmark and quality scoring harness."""
