"""
handlers/ - Presentation Layer
================================
Flask blueprints. Each handler parses the HTTP request, delegates to the
appropriate Service, and shapes the JSON response.
No business logic lives here; errors are translated centrally in server.py.
"""
