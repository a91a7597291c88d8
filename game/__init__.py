"""Round logic, configuration and screen management"""
