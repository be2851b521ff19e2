"""
Observability for dclone-tracker: loguru logging, Prometheus metrics
and the optional status HTTP server.
"""
