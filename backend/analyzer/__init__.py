"""Event analyzer: item-based event recommendations"""
