from enum import Enum

class Environment(Enum):
    DEV = "dev"
    TEST = "test"
    PROD = "prod"
