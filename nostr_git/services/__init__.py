from nostr_git.services.branch_service import BranchService, get_branch_service

__all__ = ["BranchService", "get_branch_service"]
