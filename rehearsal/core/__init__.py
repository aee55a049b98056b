"""Core application components.

This module provides the foundational components for the Rehearsal Review API:
- Database connection management via Prisma
- Application settings and configuration
- Supabase storage access for videos and screenshots
- Logging setup
"""
