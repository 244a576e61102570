"""
ai/ - Generative AI Integration
===============================
Talks to Google Gemini. The model is treated as an untrusted text producer:
its reply is only accepted after strict JSON and shape checks.
"""
