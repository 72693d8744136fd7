"""Issue browser components.

- Settings loaded from the environment / .env
- Logging setup
- Jira REST client, project resolver and records
- Issue filtering and text rendering for the CLI
"""
