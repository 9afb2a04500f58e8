"""Resource generators, one per Confluent resource type."""
