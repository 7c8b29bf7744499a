"""
ScholarBeacon Backend: Services Layer
=====================================

What:  Logic between routes (HTTP) and the collection accessors (MongoDB).
How:   Stateless service singletons; each call receives the request's Store.

Service Inventory:
    - enrichment:           enrich() and the three joins used by the API
    - UserService:          create / list / by email / profile patch
    - ScholarshipService:   list / by id
    - ApplicationService:   create / list / by applicant (enriched) / delete
    - ReviewService:        create / list / by scholarship and by reviewer (enriched)
    - PaymentProcessor:     abstract payment interface + to_minor_units()
    - StripePaymentService: Stripe PaymentIntent creation
"""
