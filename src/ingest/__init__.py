"""Parallel snapshot ingestion.

This package discovers input files, parses snapshot rows, and folds
them into per-worker aggregates on a thread pool.
"""
