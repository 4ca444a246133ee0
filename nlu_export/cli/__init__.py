"""Command-line entry point"""
