"""Infrastructure: SQLAlchemy-backed repositories and identity resolution"""
