"""
Services module for business logic separation.

This module contains the services that connect the cleaning pipeline to
the Internet Archive and to the catalog database, keeping that logic out
of the API endpoints.
"""
