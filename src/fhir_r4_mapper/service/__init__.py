"""Web service module exposing the mapper over HTTP."""
