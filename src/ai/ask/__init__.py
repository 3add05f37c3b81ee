"""
Ask-anything module for the Re:cinq knowledge chat.

Answers a single question with context from the knowledge base, logs the
exchange, and returns the answer together with the sources it cited.
"""
