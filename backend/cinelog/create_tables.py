from cinelog.db import engine, Base
# Import every model so the metadata is complete
from cinelog.models import *

def main():
    """Create all database tables"""
    Base.metadata.create_all(bind=engine)
    print("All tables created successfully.")

if __name__ == "__main__":
    main()
