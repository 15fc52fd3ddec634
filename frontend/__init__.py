"""Streamlit front end for the ResumeAI backend."""
