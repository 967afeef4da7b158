"""UPS carrier adapter: wire mapping, token cache, rating client, and dispatch."""
