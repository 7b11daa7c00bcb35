#!/usr/bin/env python3
"""Simple script to run the Assessment Extractor API"""
import uvicorn

from assessment_extractor.config import API_HOST, API_PORT

if __name__ == "__main__":
    uvicorn.run("assessment_extractor.api:app", host=API_HOST, port=API_PORT, reload=True)
