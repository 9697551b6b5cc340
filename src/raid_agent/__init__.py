"""
raid-agent - Interactive diagnostic agent for Linux and Kubernetes hosts.

This package drives an inference provider through a bounded loop of
read-only diagnostic commands until a problem is explained, the operator
is asked a question, or the tool call budget runs out.

Main entry points:
    - raid_agent.main: CLI entrypoint
    - raid_agent.core.agent: AgentSession for programmatic use
    - raid_agent.models.config: Config and load_env()
"""
