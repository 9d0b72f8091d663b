"""Handlers that build log entries for individual Kubernetes resource kinds."""