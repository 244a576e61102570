"""
client/ - Dashboard Client
==========================
A terminal rendition of the dashboard front end: it talks to the REST API,
computes the derived views locally and renders them as text.
"""
