"""Aggregate storage and export layer.

This package holds the per-drive aggregate model, the reduction
rule that combines worker aggregates, and the table exporter.
"""
