"""
ScholarBeacon Backend: API Routes Package
=========================================

Route Inventory:
    - root.py:          GET  /                       (liveness text)
                        GET  /health                 (dependency status)
    - users.py:         POST/GET/PATCH /users, GET /users/{email}
    - scholarships.py:  GET  /scholarships, GET /scholarships/{id}
    - applications.py:  POST/GET /applications, GET /applications/{applicant_id},
                        DELETE /applications/{id}
    - reviews.py:       POST/GET /reviews, GET /reviews/{scholarship_id},
                        GET /reviews/r_id/{reviewer_id}
    - payments.py:      POST /create-payment-intent

Handlers stay thin: read the request, call a service, return its result.
Errors are raised, never caught here; main.register_exception_handlers maps
them to responses.
"""
