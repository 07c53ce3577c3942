"""
Services layer - Business logic goes here.
Keep services focused on specific domains (reports, notifications, auth, appointments).

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Services raise app.core.exceptions errors; routes never build error responses
- Collaborators (document store, mail transport, photo storage) are injected
"""
