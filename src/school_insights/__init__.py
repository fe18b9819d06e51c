"""
School Insights

Attendance estimation, alert classification and narrative reporting for
schools browsed on the regional school map, with a remote regional-insight
service and a local fallback when it is unavailable.
"""

__version__ = "0.1.0"
