# Upstream model clients: Gemini over HTTP, echo for local dev.
