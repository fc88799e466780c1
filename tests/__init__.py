"""
Test suite for the Clinic Management System.

Contains integration tests that drive the API through FastAPI's TestClient.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
