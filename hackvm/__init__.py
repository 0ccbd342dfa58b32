"""Translator from stack VM code to Hack assembly."""
