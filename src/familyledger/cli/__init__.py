"""
Command Line Interface Package

Unified CLI for the family ledger.

Command Structure:
- ledger: Main entry point with utility commands (version, config)
- ledger split: Divide an amount across family members
- ledger report: Totals, monthly, category, median and KPI reports
- ledger compare: Side-by-side comparison of filter cases
- ledger compare-months: Two reporting months with category deltas
"""
