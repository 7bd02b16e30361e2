"""versionproxy -- cached, normalized version listings for Minecraft servers and Docker images."""
