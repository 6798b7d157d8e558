"""
Contract Template Engine

Renders Solidity source text for a single token block. Dispatch is a plain
table from standard to generator function; the generators share nothing
beyond the formatting helpers in this module.

Rendering is pure: the same block always produces the same text, and
nothing here reads or writes persisted state. Callers store the result as
the block's contract preview.
"""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import structlog
from jinja2 import Environment, StrictUndefined

from tokenforge.config import get_settings
from tokenforge.schemas.metadata import (
    AnyMetadata,
    ERC1155Metadata,
    ERC1400Metadata,
    ERC3525Metadata,
    ERC4626Metadata,
    parse_metadata,
)
from tokenforge.schemas.token import TokenBlock, TokenStandard

logger = structlog.get_logger()

BlockLike = Union[TokenBlock, Mapping[str, Any]]

_WHITESPACE = re.compile(r"\s+")


class UnsupportedStandardError(ValueError):
    """Raised when a block names a standard outside the supported set"""

    def __init__(self, standard: Any):
        self.standard = standard
        super().__init__(f"Unsupported token standard: {standard!r}")


def contract_identifier(name: Optional[str]) -> str:
    """Contract identifier for a block name: the name with all whitespace removed"""
    return _WHITESPACE.sub("", name or "")


def solidity_string(value: Any) -> str:
    """Escape text for use inside a double-quoted Solidity string literal"""
    text = "" if value is None else str(value)
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


def single_line(value: Any) -> str:
    """Collapse text onto one line for use in a // comment"""
    return " ".join(("" if value is None else str(value)).split())


def numeral(value: Any) -> str:
    """Render an amount as an integer literal where possible"""
    if value is None or isinstance(value, bool) or value == "":
        return "0"
    if isinstance(value, int):
        return str(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0"
    if number != number or number in (float("inf"), float("-inf")):
        return "0"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def unix_timestamp(value: Any) -> Optional[int]:
    """Seconds since the epoch for an ISO date, read as UTC; None when unparseable"""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


_env = Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
    undefined=StrictUndefined,
    autoescape=False,
)
_env.filters["sol"] = solidity_string
_env.filters["numeral"] = numeral
_env.filters["oneline"] = single_line
_env.filters["bool"] = lambda value: "true" if value else "false"

_HEADER = """\
// SPDX-License-Identifier: {{ license }}
pragma solidity {{ pragma }};
"""


ERC20_TEMPLATE = _env.from_string(_HEADER + """
contract {{ identifier }} {
    string public name = "{{ name | sol }}";
    string public symbol = "{{ symbol | sol }}";
    uint8 public decimals = {{ decimals }};
    uint256 public totalSupply = {{ total_supply | numeral }};
    mapping(address => uint256) public balanceOf;
    mapping(address => mapping(address => uint256)) public allowance;

    event Transfer(address indexed from, address indexed to, uint256 value);
    event Approval(address indexed owner, address indexed spender, uint256 value);

    constructor() {
        balanceOf[msg.sender] = totalSupply;
    }

    function transfer(address to, uint256 amount) public returns (bool) {
        require(balanceOf[msg.sender] >= amount, "Insufficient balance");
        balanceOf[msg.sender] -= amount;
        balanceOf[to] += amount;
        emit Transfer(msg.sender, to, amount);
        return true;
    }

    function approve(address spender, uint256 amount) public returns (bool) {
        allowance[msg.sender][spender] = amount;
        emit Approval(msg.sender, spender, amount);
        return true;
    }

    function transferFrom(address from, address to, uint256 amount) public returns (bool) {
        require(balanceOf[from] >= amount, "Insufficient balance");
        require(allowance[from][msg.sender] >= amount, "Insufficient allowance");
        balanceOf[from] -= amount;
        balanceOf[to] += amount;
        allowance[from][msg.sender] -= amount;
        emit Transfer(from, to, amount);
        return true;
    }
}""")


ERC721_TEMPLATE = _env.from_string(_HEADER + """
contract {{ identifier }} {
    string public name = "{{ name | sol }}";
    string public symbol = "{{ symbol | sol }}";

    // Mapping from token ID to owner address
    mapping(uint256 => address) private _owners;
    // Mapping owner address to token count
    mapping(address => uint256) private _balances;
    // Mapping from token ID to approved address
    mapping(uint256 => address) private _tokenApprovals;
    // Mapping from owner to operator approvals
    mapping(address => mapping(address => bool)) private _operatorApprovals;
    // Mapping from token ID to token URI
    mapping(uint256 => string) private _tokenURIs;

    event Transfer(address indexed from, address indexed to, uint256 indexed tokenId);
    event Approval(address indexed owner, address indexed approved, uint256 indexed tokenId);
    event ApprovalForAll(address indexed owner, address indexed operator, bool approved);

    /**
     * @dev Returns the number of tokens in an account
     */
    function balanceOf(address owner) public view returns (uint256) {
        require(owner != address(0), "ERC721: address zero is not a valid owner");
        return _balances[owner];
    }

    /**
     * @dev Returns the owner of the token
     */
    function ownerOf(uint256 tokenId) public view returns (address) {
        address owner = _owners[tokenId];
        require(owner != address(0), "ERC721: invalid token ID");
        return owner;
    }

    /**
     * @dev Returns the token URI
     */
    function tokenURI(uint256 tokenId) public view returns (string memory) {
        require(_exists(tokenId), "ERC721: URI query for nonexistent token");
        return _tokenURIs[tokenId];
    }

    /**
     * @dev Transfers ownership of a token
     */
    function transferFrom(address from, address to, uint256 tokenId) public {
        require(_isApprovedOrOwner(msg.sender, tokenId), "ERC721: caller is not token owner or approved");
        _transfer(from, to, tokenId);
    }

    /**
     * @dev Gives permission to transfer a token
     */
    function approve(address to, uint256 tokenId) public {
        address owner = ownerOf(tokenId);
        require(to != owner, "ERC721: approval to current owner");
        require(
            msg.sender == owner || isApprovedForAll(owner, msg.sender),
            "ERC721: approve caller is not token owner or approved for all"
        );
        _tokenApprovals[tokenId] = to;
        emit Approval(owner, to, tokenId);
    }

    /**
     * @dev Approve or remove operator for all tokens
     */
    function setApprovalForAll(address operator, bool approved) public {
        require(operator != msg.sender, "ERC721: approve to caller");
        _operatorApprovals[msg.sender][operator] = approved;
        emit ApprovalForAll(msg.sender, operator, approved);
    }

    /**
     * @dev Returns the approved address for a token
     */
    function getApproved(uint256 tokenId) public view returns (address) {
        require(_exists(tokenId), "ERC721: approved query for nonexistent token");
        return _tokenApprovals[tokenId];
    }

    /**
     * @dev Returns if an address is an approved operator
     */
    function isApprovedForAll(address owner, address operator) public view returns (bool) {
        return _operatorApprovals[owner][operator];
    }

    function _exists(uint256 tokenId) internal view returns (bool) {
        return _owners[tokenId] != address(0);
    }

    function _isApprovedOrOwner(address spender, uint256 tokenId) internal view returns (bool) {
        address owner = ownerOf(tokenId);
        return (spender == owner || isApprovedForAll(owner, spender) || getApproved(tokenId) == spender);
    }

    function _transfer(address from, address to, uint256 tokenId) internal {
        require(ownerOf(tokenId) == from, "ERC721: transfer from incorrect owner");
        require(to != address(0), "ERC721: transfer to the zero address");

        _beforeTokenTransfer(from, to, tokenId);

        _balances[from] -= 1;
        _balances[to] += 1;
        _owners[tokenId] = to;

        emit Transfer(from, to, tokenId);

        _afterTokenTransfer(from, to, tokenId);
    }

    /**
     * @dev Hook that is called before any token transfer
     */
    function _beforeTokenTransfer(address from, address to, uint256 tokenId) internal virtual {}

    /**
     * @dev Hook that is called after any token transfer
     */
    function _afterTokenTransfer(address from, address to, uint256 tokenId) internal virtual {}
}""")


ERC1155_TEMPLATE = _env.from_string(_HEADER + """
contract {{ identifier }} {
    string public name = "{{ name | sol }}";
    string public symbol = "{{ symbol | sol }}";

    // Mapping from token ID to account balances
    mapping(uint256 => mapping(address => uint256)) private _balances;
    // Mapping from account to operator approvals
    mapping(address => mapping(address => bool)) private _operatorApprovals;
    // Mapping for token URIs
    mapping(uint256 => string) private _uris;

    event TransferSingle(address indexed operator, address indexed from, address indexed to, uint256 id, uint256 value);
    event TransferBatch(address indexed operator, address indexed from, address indexed to, uint256[] ids, uint256[] values);
    event ApprovalForAll(address indexed account, address indexed operator, bool approved);
    event URI(string value, uint256 indexed id);
{% if tokens %}

    constructor() {
{% for token in tokens %}
        // Token #{{ loop.index }}: {{ token.type.value }}{% if token.name %} ({{ token.name | oneline }}){% endif %}

{% if token.uri %}
        _uris[{{ loop.index }}] = "{{ token.uri | sol }}";
        emit URI("{{ token.uri | sol }}", {{ loop.index }});
{% endif %}
{% if token.amount > 0 %}
        _balances[{{ loop.index }}][msg.sender] = {{ token.amount }};
        emit TransferSingle(msg.sender, address(0), msg.sender, {{ loop.index }}, {{ token.amount }});
{% endif %}
{% endfor %}
    }
{% endif %}

    /**
     * @dev Returns the URI for token type `id`.
     */
    function uri(uint256 id) public view returns (string memory) {
        return _uris[id];
    }

    /**
     * @dev Returns the amount of tokens of token type `id` owned by `account`.
     */
    function balanceOf(address account, uint256 id) public view returns (uint256) {
        require(account != address(0), "ERC1155: address zero is not a valid owner");
        return _balances[id][account];
    }

    /**
     * @dev Transfers `amount` tokens of token type `id` from `from` to `to`.
     */
    function safeTransferFrom(
        address from,
        address to,
        uint256 id,
        uint256 amount,
        bytes memory data
    ) public {
        require(
            from == msg.sender || isApprovedForAll(from, msg.sender),
            "ERC1155: caller is not token owner or approved"
        );
        require(to != address(0), "ERC1155: transfer to the zero address");

        _beforeTokenTransfer(from, to, id, amount);

        uint256 fromBalance = _balances[id][from];
        require(fromBalance >= amount, "ERC1155: insufficient balance for transfer");
        _balances[id][from] = fromBalance - amount;
        _balances[id][to] += amount;

        emit TransferSingle(msg.sender, from, to, id, amount);
    }

    /**
     * @dev Batched version of safeTransferFrom.
     */
    function safeBatchTransferFrom(
        address from,
        address to,
        uint256[] memory ids,
        uint256[] memory amounts,
        bytes memory data
    ) public {
        require(
            from == msg.sender || isApprovedForAll(from, msg.sender),
            "ERC1155: caller is not token owner or approved"
        );
        require(to != address(0), "ERC1155: transfer to the zero address");
        require(ids.length == amounts.length, "ERC1155: ids and amounts length mismatch");

        for (uint256 i = 0; i < ids.length; ++i) {
            uint256 id = ids[i];
            uint256 amount = amounts[i];

            _beforeTokenTransfer(from, to, id, amount);

            uint256 fromBalance = _balances[id][from];
            require(fromBalance >= amount, "ERC1155: insufficient balance for transfer");
            _balances[id][from] = fromBalance - amount;
            _balances[id][to] += amount;
        }

        emit TransferBatch(msg.sender, from, to, ids, amounts);
    }

    /**
     * @dev Grants or revokes permission to `operator` to transfer the caller's tokens.
     */
    function setApprovalForAll(address operator, bool approved) public {
        require(msg.sender != operator, "ERC1155: setting approval status for self");
        _operatorApprovals[msg.sender][operator] = approved;
        emit ApprovalForAll(msg.sender, operator, approved);
    }

    /**
     * @dev Returns true if `operator` is approved to transfer ``account``'s tokens.
     */
    function isApprovedForAll(address account, address operator) public view returns (bool) {
        return _operatorApprovals[account][operator];
    }

    /**
     * @dev Hook that is called before any token transfer.
     */
    function _beforeTokenTransfer(
        address from,
        address to,
        uint256 id,
        uint256 amount
    ) internal virtual {}
}""")


ERC1400_TEMPLATE = _env.from_string(_HEADER + """
contract {{ identifier }} {
    string public name = "{{ name | sol }}";
    string public symbol = "{{ symbol | sol }}";
    uint8 public decimals = {{ decimals }};
    uint256 public totalSupply;
    address public admin;

    // Mapping from investor to balance
    mapping(address => uint256) private _balances;
    // Mapping from investor to KYC status
    mapping(address => bool) private _kyc;
    // Mapping from investor to jurisdiction
    mapping(address => string) private _jurisdictions;
    // Mapping from jurisdiction to restriction status
    mapping(string => bool) private _restrictedJurisdictions;
    // Mapping from investor to lock-up end time
    mapping(address => uint256) private _lockupEndTime;

    // Issuance and maturity dates
    uint256 public issuanceDate;
    uint256 public maturityDate;

    // Transfer restriction flags
    bool public transferRestrictions;
    bool public lockupPeriods;

    event Transfer(address indexed from, address indexed to, uint256 value);
    event Issuance(address indexed to, uint256 value);
    event Redemption(address indexed from, uint256 value);
    event KYCUpdated(address indexed investor, bool status);
    event JurisdictionRestrictionUpdated(string jurisdiction, bool restricted);

    modifier onlyAdmin() {
        require(msg.sender == admin, "ERC1400: caller is not the admin");
        _;
    }

    constructor() {
        admin = msg.sender;
{% if issuance_timestamp is not none %}
        issuanceDate = {{ issuance_timestamp }};
{% else %}
        issuanceDate = block.timestamp;
{% endif %}
{% if maturity_timestamp is not none %}
        maturityDate = {{ maturity_timestamp }};
{% endif %}
        transferRestrictions = {{ transfer_restrictions | bool }};
        lockupPeriods = {{ lockup_periods | bool }};
{% for jurisdiction in restricted_jurisdictions %}
        _restrictedJurisdictions["{{ jurisdiction | sol }}"] = true;
{% endfor %}
    }

    /**
     * @dev Returns the balance of an investor
     */
    function balanceOf(address account) public view returns (uint256) {
        return _balances[account];
    }

    /**
     * @dev Checks if an investor is KYC verified
     */
    function isKYCVerified(address investor) public view returns (bool) {
        return _kyc[investor];
    }

    /**
     * @dev Checks if a jurisdiction is restricted
     */
    function isJurisdictionRestricted(string memory jurisdiction) public view returns (bool) {
        return _restrictedJurisdictions[jurisdiction];
    }

    /**
     * @dev Transfers tokens with compliance checks
     */
    function transfer(address to, uint256 amount) public returns (bool) {
        require(_balances[msg.sender] >= amount, "ERC1400: insufficient balance");

        // Compliance checks
        if (transferRestrictions) {
            require(_kyc[msg.sender] && _kyc[to], "ERC1400: KYC verification required");
            require(!isJurisdictionRestricted(_jurisdictions[to]), "ERC1400: recipient in restricted jurisdiction");
        }

        // Lock-up period check
        if (lockupPeriods) {
            require(block.timestamp >= _lockupEndTime[msg.sender], "ERC1400: tokens are locked");
        }

        _balances[msg.sender] -= amount;
        _balances[to] += amount;

        emit Transfer(msg.sender, to, amount);
        return true;
    }

    /**
     * @dev Issues new tokens to an investor (admin only)
     */
    function issue(address to, uint256 amount) public onlyAdmin {
        require(_kyc[to], "ERC1400: KYC verification required");
        require(!isJurisdictionRestricted(_jurisdictions[to]), "ERC1400: recipient in restricted jurisdiction");

        _balances[to] += amount;
        totalSupply += amount;

        emit Issuance(to, amount);
        emit Transfer(address(0), to, amount);
    }

    /**
     * @dev Redeems tokens from an investor (admin only)
     */
    function redeem(address from, uint256 amount) public onlyAdmin {
        require(_balances[from] >= amount, "ERC1400: insufficient balance");

        _balances[from] -= amount;
        totalSupply -= amount;

        emit Redemption(from, amount);
        emit Transfer(from, address(0), amount);
    }

    /**
     * @dev Updates KYC status for an investor (admin only)
     */
    function setKYC(address investor, bool status) public onlyAdmin {
        _kyc[investor] = status;

        emit KYCUpdated(investor, status);
    }

    /**
     * @dev Sets jurisdiction for an investor (admin only)
     */
    function setJurisdiction(address investor, string memory jurisdiction) public onlyAdmin {
        _jurisdictions[investor] = jurisdiction;
    }

    /**
     * @dev Sets restricted jurisdiction status (admin only)
     */
    function setRestrictedJurisdiction(string memory jurisdiction, bool restricted) public onlyAdmin {
        _restrictedJurisdictions[jurisdiction] = restricted;

        emit JurisdictionRestrictionUpdated(jurisdiction, restricted);
    }

    /**
     * @dev Sets lock-up period for an investor (admin only)
     */
    function setLockup(address investor, uint256 endTime) public onlyAdmin {
        _lockupEndTime[investor] = endTime;
    }
}""")


ERC3525_TEMPLATE = _env.from_string(_HEADER + """
contract {{ identifier }} {
    string public name = "{{ name | sol }}";
    string public symbol = "{{ symbol | sol }}";
    uint8 public valueDecimals = {{ decimals }};

    // Mapping from token ID to owner address
    mapping(uint256 => address) private _owners;
    // Mapping from token ID to slot
    mapping(uint256 => uint256) private _slots;
    // Mapping from token ID to value
    mapping(uint256 => uint256) private _values;
    // Mapping from owner to token count
    mapping(address => uint256) private _balances;
    // Mapping from token ID to approved address
    mapping(uint256 => address) private _tokenApprovals;
    // Mapping from owner to operator approvals
    mapping(address => mapping(address => bool)) private _operatorApprovals;

    event Transfer(address indexed from, address indexed to, uint256 indexed tokenId);
    event TransferValue(uint256 indexed fromTokenId, uint256 indexed toTokenId, uint256 value);
    event ApprovalValue(uint256 indexed tokenId, address indexed operator, uint256 value);
    event SlotChanged(uint256 indexed tokenId, uint256 indexed oldSlot, uint256 indexed newSlot);
{% if initial_value %}

    constructor() {
        _mint(msg.sender, {{ initial_token_id }}, {{ slot }}, {{ initial_value }});
    }
{% endif %}

    /**
     * @dev Returns the slot of a token
     */
    function slotOf(uint256 tokenId) public view returns (uint256) {
        require(_exists(tokenId), "ERC3525: slot query for nonexistent token");
        return _slots[tokenId];
    }

    /**
     * @dev Returns the value of a token
     */
    function valueOf(uint256 tokenId) public view returns (uint256) {
        require(_exists(tokenId), "ERC3525: value query for nonexistent token");
        return _values[tokenId];
    }

    /**
     * @dev Transfers value from one token to another in the same slot
     */
    function transferValueFrom(
        uint256 fromTokenId,
        uint256 toTokenId,
        uint256 value
    ) public {
        require(_exists(fromTokenId), "ERC3525: transfer from nonexistent token");
        require(_exists(toTokenId), "ERC3525: transfer to nonexistent token");
        require(_slots[fromTokenId] == _slots[toTokenId], "ERC3525: transfer between different slots");
        require(_values[fromTokenId] >= value, "ERC3525: insufficient value");

        _values[fromTokenId] -= value;
        _values[toTokenId] += value;

        emit TransferValue(fromTokenId, toTokenId, value);
    }

    /**
     * @dev Creates a new token with a specific slot and value
     */
    function _mint(
        address to,
        uint256 tokenId,
        uint256 slot,
        uint256 value
    ) internal {
        require(to != address(0), "ERC3525: mint to the zero address");
        require(!_exists(tokenId), "ERC3525: token already minted");

        _owners[tokenId] = to;
        _slots[tokenId] = slot;
        _values[tokenId] = value;
        _balances[to] += 1;

        emit Transfer(address(0), to, tokenId);
        emit SlotChanged(tokenId, 0, slot);
    }

    function _exists(uint256 tokenId) internal view returns (bool) {
        return _owners[tokenId] != address(0);
    }

    /**
     * @dev Splits a token into two by creating a new token with part of the value
     */
    function _splitValue(
        uint256 tokenId,
        uint256 value,
        address to
    ) internal returns (uint256 newTokenId) {
        require(_exists(tokenId), "ERC3525: split from nonexistent token");
        require(_values[tokenId] >= value, "ERC3525: insufficient value");

        // Next unused token ID after the source token
        newTokenId = tokenId + 1;
        while (_exists(newTokenId)) {
            newTokenId++;
        }

        // Mint new token with same slot but split value
        _mint(to, newTokenId, _slots[tokenId], value);

        // Reduce value from original token
        _values[tokenId] -= value;

        return newTokenId;
    }
}""")


ERC4626_TEMPLATE = _env.from_string(_HEADER + """
contract {{ identifier }} {
    string public name = "{{ name | sol }}";
    string public symbol = "{{ symbol | sol }}";
    uint8 public decimals = {{ decimals }};
{% if asset %}
    // Underlying asset: {{ asset | oneline }}
{% endif %}
    address public asset;

    // Mapping of user address to their share balance
    mapping(address => uint256) private _shares;
    // Total shares issued
    uint256 private _totalShares;
    // Total assets managed by the vault
    uint256 private _totalAssets;

    event Deposit(address indexed caller, address indexed owner, uint256 assets, uint256 shares);
    event Withdraw(address indexed caller, address indexed receiver, address indexed owner, uint256 assets, uint256 shares);

    constructor(address _asset) {
        asset = _asset;
    }

    /**
     * @dev Returns the total amount of the underlying asset managed by this vault.
     */
    function totalAssets() public view returns (uint256) {
        return _totalAssets;
    }

    /**
     * @dev Returns the amount of shares owned by an account.
     */
    function balanceOf(address account) public view returns (uint256) {
        return _shares[account];
    }

    /**
     * @dev Returns the total amount of shares issued by this vault.
     */
    function totalSupply() public view returns (uint256) {
        return _totalShares;
    }

    /**
     * @dev Deposits assets into the vault and receives shares in return.
     */
    function deposit(uint256 assets, address receiver) public returns (uint256 shares) {
        shares = convertToShares(assets);

        _shares[receiver] += shares;
        _totalShares += shares;
        _totalAssets += assets;

        emit Deposit(msg.sender, receiver, assets, shares);
        return shares;
    }

    /**
     * @dev Withdraws assets from the vault by burning shares.
     */
    function withdraw(uint256 assets, address receiver, address owner) public returns (uint256 shares) {
        shares = convertToShares(assets);

        require(_shares[owner] >= shares, "ERC4626: insufficient shares");

        _shares[owner] -= shares;
        _totalShares -= shares;
        _totalAssets -= assets;

        emit Withdraw(msg.sender, receiver, owner, assets, shares);
        return shares;
    }

    /**
     * @dev Converts an amount of assets to an equivalent amount of shares.
     * An empty or drained vault converts 1:1.
     */
    function convertToShares(uint256 assets) public view returns (uint256) {
        uint256 supply = totalSupply();
        uint256 managed = totalAssets();
        return (supply == 0 || managed == 0) ? assets : (assets * supply) / managed;
    }

    /**
     * @dev Converts an amount of shares to an equivalent amount of assets.
     * An empty vault converts 1:1.
     */
    function convertToAssets(uint256 shares) public view returns (uint256) {
        uint256 supply = totalSupply();
        return supply == 0 ? shares : (shares * totalAssets()) / supply;
    }

    /**
     * @dev Returns the maximum amount of assets that can be withdrawn.
     */
    function maxWithdraw(address owner) public view returns (uint256) {
        return convertToAssets(_shares[owner]);
    }
}""")


@dataclass
class BlockView:
    """The fields a generator reads, normalized from a full or partial block"""
    standard: TokenStandard
    name: str
    symbol: str
    decimals: int
    total_supply: Any
    metadata: AnyMetadata

    @property
    def identifier(self) -> str:
        return contract_identifier(self.name)


def _field(block: BlockLike, attr: str, key: str) -> Any:
    if isinstance(block, TokenBlock):
        return getattr(block, attr)
    value = block.get(key)
    if value is None:
        value = block.get(attr)
    return value


def resolve_standard(block: BlockLike) -> TokenStandard:
    """The block's standard, or UnsupportedStandardError"""
    raw = _field(block, "standard", "standard")
    try:
        return TokenStandard(raw)
    except (TypeError, ValueError):
        logger.error("Unsupported token standard", standard=raw)
        raise UnsupportedStandardError(raw) from None


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def block_view(block: BlockLike) -> BlockView:
    standard = resolve_standard(block)
    return BlockView(
        standard=standard,
        name=str(_field(block, "name", "name") or ""),
        symbol=str(_field(block, "symbol", "symbol") or ""),
        decimals=_as_int(_field(block, "decimals", "decimals")),
        total_supply=_field(block, "total_supply", "totalSupply"),
        metadata=parse_metadata(standard, _field(block, "metadata", "metadata")),
    )


def _settings_context() -> Dict[str, Any]:
    settings = get_settings()
    return {"license": settings.contract_license, "pragma": settings.solidity_pragma}


def _base_context(view: BlockView) -> Dict[str, Any]:
    context = _settings_context()
    context.update(
        identifier=view.identifier,
        name=view.name,
        symbol=view.symbol,
        decimals=view.decimals,
        total_supply=view.total_supply,
    )
    return context


def erc20_template(view: BlockView) -> str:
    return ERC20_TEMPLATE.render(**_base_context(view))


def erc721_template(view: BlockView) -> str:
    return ERC721_TEMPLATE.render(**_base_context(view))


def erc1155_template(view: BlockView) -> str:
    metadata: ERC1155Metadata = view.metadata
    return ERC1155_TEMPLATE.render(tokens=list(metadata.tokens), **_base_context(view))


def erc1400_template(view: BlockView) -> str:
    metadata: ERC1400Metadata = view.metadata
    context = _base_context(view)
    # security tokens default to 18 decimals when none are configured
    context["decimals"] = view.decimals or 18
    # keep first occurrence order, drop blanks and repeats
    jurisdictions: List[str] = []
    for jurisdiction in metadata.restricted_jurisdictions:
        if jurisdiction and jurisdiction not in jurisdictions:
            jurisdictions.append(jurisdiction)
    return ERC1400_TEMPLATE.render(
        transfer_restrictions=metadata.transfer_restrictions,
        lockup_periods=metadata.lockup_periods,
        restricted_jurisdictions=jurisdictions,
        issuance_timestamp=unix_timestamp(metadata.issuance_date),
        maturity_timestamp=unix_timestamp(metadata.maturity_date),
        **context,
    )


def erc3525_template(view: BlockView) -> str:
    metadata: ERC3525Metadata = view.metadata
    return ERC3525_TEMPLATE.render(
        slot=numeral(metadata.slot),
        initial_token_id=numeral(metadata.token_id or 1),
        initial_value=numeral(metadata.value) if metadata.value else "",
        **_base_context(view),
    )


def erc4626_template(view: BlockView) -> str:
    metadata: ERC4626Metadata = view.metadata
    return ERC4626_TEMPLATE.render(
        asset=metadata.asset or metadata.underlying_asset,
        **_base_context(view),
    )


TEMPLATES: Dict[TokenStandard, Callable[[BlockView], str]] = {
    TokenStandard.ERC20: erc20_template,
    TokenStandard.ERC721: erc721_template,
    TokenStandard.ERC1155: erc1155_template,
    TokenStandard.ERC1400: erc1400_template,
    TokenStandard.ERC3525: erc3525_template,
    TokenStandard.ERC4626: erc4626_template,
}


def generate_contract(block: BlockLike) -> str:
    """Render the Solidity source for a block.

    Accepts a validated TokenBlock or a partially filled mapping in the
    camelCase wire shape. Raises UnsupportedStandardError when the block's
    standard is not one of the supported tags.
    """
    view = block_view(block)
    return TEMPLATES[view.standard](view)
