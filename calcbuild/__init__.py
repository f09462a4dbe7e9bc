"""
CalcBuild — local-first wall material estimator.

Rooms and unit prices in; wall area, paint volume and paint, render and
insulation costs out. Projects are kept in a local key-value store and can be
exported as CSV or a printable PDF report.
"""
