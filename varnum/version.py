"""0.1.0"""
