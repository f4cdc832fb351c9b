"""Result type, structured errors, domain records and payload validation."""
