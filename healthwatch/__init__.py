"""
Healthwatch - health-check orchestration service.

Layer Structure:
- Domain: Check configurations, results and status rules
- Application: Execution engine, stores, scheduler, use cases and DTOs
- Infrastructure: HTTP, database and system checkers, event sink
- Presentation: FastAPI routers
- Shared: Constants and logging
- Main: Composition root, application entry point and configuration
"""

__version__ = "1.0.0"
