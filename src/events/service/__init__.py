"""Domain services of the events app.

Mutating services run in one transaction and keep the per-event summaries in step
with the rows they change.
"""
