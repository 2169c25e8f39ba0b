"""Agentic planner web application"""
