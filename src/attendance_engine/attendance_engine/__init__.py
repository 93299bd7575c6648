"""Attendance Engine package.

Pure evaluation engine (normalizer, classifier, compliance monitor) plus
a thin Flask controller layer and service/repository layers around it.
"""
