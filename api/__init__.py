"""Demand Review API.

FastAPI backend for the demand review page, providing:
- Planning sessions (historical sales + editable forecast grid)
- Cell edits with rolled-up totals
- Sample forecast loading
- Chart series with trend lines

All state is in memory and lost on restart.
"""
