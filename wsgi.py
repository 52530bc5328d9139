"""
CivicHub - WSGI Entry Point za Gunicorn.

Koristi se u produkciji: gunicorn wsgi:app
"""

from dotenv import load_dotenv

# Ucitaj .env fajl ako postoji
load_dotenv()

from civichub import create_app

app = create_app()
