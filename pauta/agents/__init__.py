"""Pipeline agents: research, writing, fact-checking and topic ideas."""
