"""FastAPI glue: turning navigation signals into redirects and reading form payloads."""
