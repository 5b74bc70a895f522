"""
Streamlit dashboard and console entry point.
"""
