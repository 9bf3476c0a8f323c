"""Domain layer — pure values shared by rules, shells, and services."""
