"""Application wiring: configuration, database, FastAPI app"""
