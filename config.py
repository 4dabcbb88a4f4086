"""
Configuration Management
Setup form defaults loaded from environment variables
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Application configuration"""

    # Schedule defaults offered by the setup form
    DEFAULT_DAYS_SHIFT1 = int(os.getenv("DEFAULT_DAYS_SHIFT1", 5))
    DEFAULT_DAYS_SHIFT2 = int(os.getenv("DEFAULT_DAYS_SHIFT2", 3))
    DEFAULT_HOURS_SHIFT1 = int(os.getenv("DEFAULT_HOURS_SHIFT1", 8))
    DEFAULT_HOURS_SHIFT2 = int(os.getenv("DEFAULT_HOURS_SHIFT2", 8))

    # Product lines offered by the setup form: (name, planned units per hour)
    DEFAULT_PRODUCTS = [
        ("Model A", 100),
        ("Model B", 80),
        ("Model C", 120),
        ("Model D", 60),
        ("Model E", 150),
    ]
