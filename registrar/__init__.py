"""
Registrar: an in-memory academic records registry for a single institution.

Ingests student and teacher rosters, links students to courses through
enrollment, tracks per-course WAM scores with observer notifications and
produces reports, rankings and department staffing counts.
"""

__version__ = "1.0.0"
__author__ = "Registrar Development Team"
__description__ = "In-memory academic records registry"
