"""
DevConnect Backend — Middleware Package
========================================

Middleware Chain (request direction):
    [Rate Limit] → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: reject abusive clients before any other work
    2. Request ID: correlation id for every log line of the request
    3. Access Log: method, path, status, duration (needs the request id)
"""
