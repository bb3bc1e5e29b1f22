"""Dependency resolution and branch shadowing for stacked PRs."""

from .directive import Directive, effective_dependency, parse_directive
from .branches import ShadowBranchManager, branch_name_for, is_shadow_branch
from .status import DependencyStatus, DependencyStatusReporter, StatusResult, compute_status
from .cascade import CascadeReparenter, CascadeResult
from .unstack import UnstackDetector
from .stacker import Stacker

__all__ = [
    'Directive', 'effective_dependency', 'parse_directive',
    'ShadowBranchManager', 'branch_name_for', 'is_shadow_branch',
    'DependencyStatus', 'DependencyStatusReporter', 'StatusResult', 'compute_status',
    'CascadeReparenter', 'CascadeResult',
    'UnstackDetector',
    'Stacker',
]
