"""tasky.util: small helpers shared by the core and the tools (timezones, parsing, clocks)."""
