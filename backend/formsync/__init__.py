"""
Form Sync Backend
=================

This is the Python package for the backend API.

HOW IT'S ORGANIZED:
------------------
- models/    = Data structures (what does a contact form look like?)
- services/  = Workers (store submissions, mirror them to Google Sheets)
- routers/   = API endpoints (the doors into our app)
- utils/     = Small helpers (upload validation)
- config.py  = Settings from environment variables
- main.py    = Puts it all together and starts the server
"""
