# core/exceptions.py
"""
Custom exceptions for the backend
"""

class AgriPulseError(Exception):
    """Base exception for the AgriPulse backend"""
    pass

class AgentError(AgriPulseError):
    """Agent-related errors"""
    pass

class AgentConfigError(AgriPulseError):
    """Agent configuration errors"""
    pass

class ExternalAPIError(AgriPulseError):
    """External API errors"""
    pass

class WeatherUnavailableError(ExternalAPIError):
    """No weather snapshot could be produced for a location"""
    pass

class EnrichmentError(AgriPulseError):
    """Natural-language explanation could not be generated"""
    pass
