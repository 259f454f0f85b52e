"""Business logic services.

Services contain all catalog logic and are called by routes:
- query / pagination / discounts: pure helpers, no I/O
- catalog: repository reads and the usage counter
- listing: page payloads assembled from the above
"""
