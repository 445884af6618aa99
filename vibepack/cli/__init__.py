"""CLI package for vibekit."""
