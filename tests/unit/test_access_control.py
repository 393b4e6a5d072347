"""Tests for the access-control detector's declaration heuristics."""

from __future__ import annotations

from clawforge.analyzers.models import Severity
from clawforge.analyzers.static.detectors.access_control import (
    detect_access_control,
    interface_ranges,
    is_signature_only,
    signature_end,
)
from clawforge.analyzers.static.patterns import split_lines


class TestInterfaceRanges:
    def test_multi_line_interface(self):
        lines = split_lines("interface IA {\n    function pause() external;\n}\ncontract B {}")
        assert interface_ranges(lines) == [(0, 2)]

    def test_single_line_interface(self):
        lines = split_lines("interface IA { function pause() external; }\ncontract B {\n}")
        assert interface_ranges(lines) == [(0, 0)]

    def test_brace_on_next_line(self):
        lines = split_lines("interface IA\n{\n    function kill() external;\n}")
        assert interface_ranges(lines) == [(0, 3)]

    def test_unterminated(self):
        lines = split_lines("interface IA {\n    function kill() external;")
        assert interface_ranges(lines) == [(0, 1)]


class TestSignatureHelpers:
    def test_signature_end_single_line(self):
        lines = split_lines("function setFee(uint256 f) external {\n    fee = f;\n}")
        assert signature_end(lines, 0) == 0
        assert not is_signature_only(lines, 0)

    def test_signature_end_multi_line(self):
        lines = split_lines("function setFee(\n    uint256 f\n) external;\n")
        assert signature_end(lines, 0) == 2
        assert is_signature_only(lines, 0)


class TestAccessControl:
    def test_flags_unguarded_setter(self):
        source = """\
contract Shop {
    uint256 public price;
    function setPrice(uint256 newPrice) external {
        price = newPrice;
    }
}
"""
        findings = detect_access_control(source, "Shop.sol")
        assert len(findings) == 1
        f = findings[0]
        assert f.id == "CF-007"
        assert f.title == "Missing Access Control on setPrice()"
        assert f.severity == Severity.MEDIUM
        assert f.location.line == 3

    def test_interface_functions_not_flagged(self):
        source = """\
interface IPausable {
    function pause() external;
    function setOwner(address owner) external;
    function upgrade(address impl) external;
}
"""
        assert detect_access_control(source, "IPausable.sol") == []

    def test_single_line_interface_then_contract(self):
        source = """\
interface IFee { function setFee(uint256 fee) external; }
contract Fees {
    uint256 public fee;
    function setFee(uint256 newFee) external {
        fee = newFee;
    }
}
"""
        findings = detect_access_control(source, "Fees.sol")
        assert [f.location.line for f in findings] == [4]

    def test_modifier_guard(self):
        source = "function pause() external onlyOwner {\n    paused = true;\n}"
        assert detect_access_control(source, "A.sol") == []

    def test_role_guard(self):
        source = "function setFee(uint256 f) external onlyRole(ADMIN_ROLE) {\n}"
        assert detect_access_control(source, "A.sol") == []

    def test_sender_check_in_body(self):
        source = """\
function kill() public {
    uint256 unused = 1;
    unused += 1;
    unused += 1;
    unused += 1;
    if (msg.sender != owner) revert();
    selfdestruct(payable(owner));
}
"""
        assert detect_access_control(source, "A.sol") == []

    def test_internal_function_not_flagged(self):
        source = "function _setFee(uint256 f) internal {\n}\nfunction setFee(uint256 f) internal {\n}"
        assert detect_access_control(source, "A.sol") == []

    def test_multi_line_signature_with_guard(self):
        source = """\
function setTreasury(
    address treasury
)
    external
    onlyOwner
{
    _treasury = treasury;
}
"""
        assert detect_access_control(source, "A.sol") == []

    def test_multi_line_signature_without_guard(self):
        source = """\
function updateOracle(
    address oracle
) external {
    _oracle = oracle;
}
"""
        findings = detect_access_control(source, "A.sol")
        assert len(findings) == 1
        assert findings[0].title == "Missing Access Control on updateOracle()"
        assert findings[0].location.line == 1

    def test_multi_line_abstract_declaration(self):
        source = """\
abstract contract Base {
    function setFee(
        uint256 fee
    ) external virtual;
}
"""
        assert detect_access_control(source, "Base.sol") == []

    def test_non_sensitive_name(self):
        source = "function deposit() external payable {\n}\nfunction mint(address to) public {\n}"
        assert detect_access_control(source, "A.sol") == []
