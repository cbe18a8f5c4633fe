"""
Services Layer

Pure business logic over the tournament document:
- Accept a Tournament (or Match) value plus a request
- Return a new value; inputs are never mutated
- Raise fixturedesk.exceptions errors instead of returning partial results
- Do NOT depend on HTTP request/response objects

document_store is the one exception: it reads and writes the database.
"""
