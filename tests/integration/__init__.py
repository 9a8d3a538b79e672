"""
Docker-based integration tests for the A2A server test container.

These start the real a2a-java-server image. Build it first with
`docker build -t a2a-java-server:latest .`; set SKIP_INTEGRATION_TESTS=true
to skip the suite.
"""
