"""
URL paths shared by the HTTP surface and the Python client.
"""

ANALYZE_PATH = "/api/analyze"
DIAGNOSIS_PATH = "/api/diagnosis"
