"""TokenForge backend"""
