"""Bundled vocabulary data files"""
