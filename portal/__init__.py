"""
Student Portal
Profiles, results with SGPA/CGPA, placements, study materials and an AI assistant.

Architecture:
- PostgreSQL: Structured data (accounts, profiles, results, placements, materials, chat)
- MongoDB GridFS: Uploaded study material files
- Chat completion API: AI assistant replies, generated in the background
"""

__version__ = "1.0.0"
