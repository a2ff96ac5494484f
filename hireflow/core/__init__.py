"""
Core business logic modules for HireFlow.

Submodules:
- lifecycle: Application status state machine and pipeline operations
- matching: Candidate-job match scoring and ranking
- jobs: Job posting management
- dashboard: Recruiter statistics
"""
