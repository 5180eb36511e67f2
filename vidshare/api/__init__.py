"""HTTP layer: request/response schemas and routers"""
