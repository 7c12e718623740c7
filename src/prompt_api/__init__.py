"""Prompt composer main server: workspaces, agent proxying and live workspace subscriptions."""
