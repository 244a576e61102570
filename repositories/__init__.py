"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific record kind.
Repositories receive raw rows from the database and return domain model objects.
Any psycopg2 failure leaves this layer as a StoreFailure.
"""
