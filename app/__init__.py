"""
Job Portal
HR users post and expire jobs and manage resumes; job seekers apply.

Architecture:
- Relational store: users, jobs, applications, resumes
- JWT identity gate shared by REST routes and the /ws socket
- In-process event bus pushing new-application / job-expired events
"""

__version__ = "1.0.0"
