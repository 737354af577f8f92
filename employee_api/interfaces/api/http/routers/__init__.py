"""
HTTP routers por bounded context (users / employees).
"""
