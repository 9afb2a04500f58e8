"""Confluent Cloud resource import.

Enumerates service accounts and API keys through the Confluent Cloud REST
API, following cursor pagination with retrying HTTP, and emits generic
resource descriptors for an infrastructure-as-code import framework.
"""
