"""
EnergiSense Backend
===================

This is the Python package for the EnergiSense energy monitoring system.

HOW IT'S ORGANIZED:
------------------
- models/     = Data structures (what does a reading or an account look like?)
- services/   = Workers (talk to MongoDB, hash passwords, sign tokens, inject data)
- routers/    = API endpoints (the doors into our app)
- dashboard/  = Terminal dashboard that polls the API
- config.py   = Settings loaded from the environment
- main.py     = Puts it all together and starts the server

Author: EnergiSense Team
"""

__version__ = "1.0.0"
