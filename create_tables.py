import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import text
from app.core.config import get_settings
from app.db import engine, Base
# Import all models at once
from app.models import *

def main():
    """Create the movies schema (if configured) and all tables"""
    schema = get_settings().DB_SCHEMA
    if schema:
        with engine.connect() as connection:
            connection.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{schema}"'))
            connection.commit()
    Base.metadata.create_all(bind=engine)
    print("All tables created successfully.")

if __name__ == "__main__":
    main()
