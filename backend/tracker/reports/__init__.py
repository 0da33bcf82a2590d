"""
Reports module for expense dashboards and exports.

The period resolver, aggregator, budget evaluator and report builder are pure
functions over in-memory expense snapshots; ReportService loads the snapshot
for a user and the routes expose the results over HTTP.
"""
