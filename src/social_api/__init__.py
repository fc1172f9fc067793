"""Social Media API: accounts and messages over HTTP."""
