"""
Test package for the estate CRM backend.

This package contains test suites for:
- REST endpoints for clients, properties, transactions and contracts
- Cursor pagination and the response envelope
- Store backends (memory, SQL, Supabase)
- The UI data layer, query cache and server-rendered pages
"""
