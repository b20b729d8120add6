"""Services: persistence, caching and external API clients."""
