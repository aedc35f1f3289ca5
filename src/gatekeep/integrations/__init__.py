"""Web framework integrations for gatekeep."""
