"""Sleep tracker session state: domain, store adapters, use cases and viewmodels."""
