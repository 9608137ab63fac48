"""
Streamlit front end for the sentiment demo.
"""
