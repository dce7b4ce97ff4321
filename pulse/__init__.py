"""
Content Pulse - Hacker News and HackTheBox content aggregator with AI analysis.
"""

__version__ = "1.0.0"
