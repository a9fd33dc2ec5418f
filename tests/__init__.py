"""CORS Scanner Test Package"""
