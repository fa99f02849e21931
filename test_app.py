#!/usr/bin/env python3
"""Smoke script to check app dependencies and database access."""

import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

try:
    print("Testing imports...")

    import streamlit as st
    print("✓ Streamlit imported successfully")

    import sqlalchemy
    print(f"✓ SQLAlchemy {sqlalchemy.__version__} imported successfully")

    from src.models.registration import Registration
    print("✓ Registration model imported successfully")

    from src.services.registration_service import get_statistics
    print("✓ Registration service imported successfully")

    from src.ui.registration_page import render_registration_page
    print("✓ Registration page UI imported successfully")

    from src.ui.admin_dashboard import render_admin_dashboard
    print("✓ Admin dashboard UI imported successfully")

    from src.api.app import app
    print("✓ API app imported successfully")

    stats = get_statistics()
    print(f"✓ Database reachable: {stats.total} registrations")

    print("\nAll imports successful! App should work.")

except Exception as e:
    print(f"✗ Error: {e}")
    import traceback
    traceback.print_exc()
