"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from manifesto.audit.logger import AuditLogger
from manifesto.cache.diagnostic_cache import DiagnosticCache
from manifesto.core.compliance_checker import PatternComplianceChecker
from manifesto.core.rule_compiler import RuleCompiler
from manifesto.core.scanner import SyntaxViolationScanner
from manifesto.engine.ai_verifier import AIComplianceVerifier
from manifesto.engine.coordinator import EnforcementCoordinator
from manifesto.engine.pre_commit import ManifestoPreCommitHook
from manifesto.engine.save_guard import ManifestoSaveGuard
from manifesto.engine.test_enforcer import CommandTestStatusOracle, TestExecutionEnforcer


@lru_cache
def get_rule_compiler() -> RuleCompiler:
    """Shared rule compiler singleton."""
    return RuleCompiler()


@lru_cache
def get_compliance_checker() -> PatternComplianceChecker:
    """Shared compliance checker singleton."""
    return PatternComplianceChecker()


@lru_cache
def get_diagnostic_cache() -> DiagnosticCache:
    """Shared diagnostic cache singleton."""
    return DiagnosticCache()


@lru_cache
def get_scanner() -> SyntaxViolationScanner:
    """Shared scanner singleton."""
    return SyntaxViolationScanner(cache=get_diagnostic_cache())


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_coordinator() -> EnforcementCoordinator:
    """Shared enforcement coordinator, delegates configured from settings."""
    return EnforcementCoordinator(
        pre_commit_hook=ManifestoPreCommitHook(),
        save_guard=ManifestoSaveGuard(),
        test_enforcer=TestExecutionEnforcer(CommandTestStatusOracle()),
        ai_verifier=AIComplianceVerifier(),
        audit_logger=get_audit_logger(),
    )
