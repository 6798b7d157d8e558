"""Sample token configurations for tests and demos"""
