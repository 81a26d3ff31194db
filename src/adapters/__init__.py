"""HTTP adapters implementing the core ports against the GitHub REST API."""
