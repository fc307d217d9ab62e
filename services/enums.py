"""
Service layer enums
String-valued so they serialize directly into JSON responses
"""

from enum import Enum


class Intensity(str, Enum):
    """How strongly a supporter says they would buy"""
    NEAT_IDEA = 'NEAT_IDEA'
    PROBABLY_BUY = 'PROBABLY_BUY'
    TAKE_MY_MONEY = 'TAKE_MY_MONEY'


class Scenario(str, Enum):
    """Revenue projection scenarios, least to most optimistic"""
    CONSERVATIVE = 'conservative'
    MODERATE = 'moderate'
    OPTIMISTIC = 'optimistic'


class ConfidenceLevel(str, Enum):
    """Discrete confidence bands for a business case"""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    VERY_HIGH = 'very_high'
