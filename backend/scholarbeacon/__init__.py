"""
ScholarBeacon Backend: Application Package
==========================================

What: Scholarship-discovery API (users, scholarships, applications, reviews,
      payment intents) backed by MongoDB.
Who:  Imported by uvicorn (`uvicorn scholarbeacon.main:app`) and by pytest.

Layering:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (joins, payments)      │  ← enrichment, Stripe bridge
    ├─────────────────────────────────────┤
    │          Schemas (contracts)        │  ← Pydantic request/response
    ├─────────────────────────────────────┤
    │   Database (collection accessors)   │  ← async pymongo
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
