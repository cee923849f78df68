"""
Parameter layouts of traced calls.

A CallSignature lists a call's parameters in the order the tracer records
them. The order is also the output order, so every record for the same
call has the same key sequence.

Array lengths are either fixed (an int or a LengthKind) or the name of a
sibling integer parameter, e.g. MPI_Waitall's requests are "count" long.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .call_record import FieldKind
from .sentinels import LengthKind
from ..symbols.categories import Category
from ..core.errors import ConversionError, ErrorCode, UnknownCallError


@dataclass(frozen=True)
class FieldSpec:
    """Declared type of one call parameter."""
    name: str
    kind: FieldKind
    category: Optional[Category] = None
    length: Any = None
    inner_length: Any = None


@dataclass(frozen=True)
class CallSignature:
    """Ordered parameter list of one call."""
    name: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


# Shorthand constructors for the catalogue below

def _int(name):
    return FieldSpec(name, FieldKind.INT)


def _int64(name):
    return FieldSpec(name, FieldKind.INT64)


def _str(name):
    return FieldSpec(name, FieldKind.STRING)


def _sym(name, category):
    return FieldSpec(name, FieldKind.SYMBOL, category=category)


def _comm(name='comm'):
    return _sym(name, Category.COMM)


def _dtype(name='datatype'):
    return _sym(name, Category.DATATYPE)


def _ints(name, length):
    return FieldSpec(name, FieldKind.INT_ARRAY, length=length)


def _func(name):
    return FieldSpec(name, FieldKind.FUNCTION)


def _sig(name, *fields):
    return CallSignature(name, tuple(fields))


_P2P_SEND = (_int('count'), _dtype(), FieldSpec('dest', FieldKind.DEST),
             FieldSpec('tag', FieldKind.TAG), _comm())
_P2P_RECV = (_int('count'), _dtype(), FieldSpec('source', FieldKind.SOURCE),
             FieldSpec('tag', FieldKind.TAG), _comm())
_REQUEST = FieldSpec('request', FieldKind.REQUEST)
_STATUS = FieldSpec('status', FieldKind.STATUS)


_CATALOGUE = [
    # Environment
    _sig('MPI_Init', _int('argc'), FieldSpec('argv', FieldKind.STRING_ARRAY, length='argc')),
    _sig('MPI_Init_thread', _int('argc'), FieldSpec('argv', FieldKind.STRING_ARRAY, length='argc'),
         _sym('required', Category.THREADLEVEL), _sym('provided', Category.THREADLEVEL)),
    _sig('MPI_Query_thread', _sym('supported', Category.THREADLEVEL)),
    _sig('MPI_Finalize'),
    _sig('MPI_Pcontrol', _int('level')),
    _sig('MPI_Get_processor_name', _str('name'), _int('resultlen')),

    # Point-to-point
    _sig('MPI_Send', *_P2P_SEND),
    _sig('MPI_Bsend', *_P2P_SEND),
    _sig('MPI_Ssend', *_P2P_SEND),
    _sig('MPI_Rsend', *_P2P_SEND),
    _sig('MPI_Isend', *_P2P_SEND, _REQUEST),
    _sig('MPI_Issend', *_P2P_SEND, _REQUEST),
    _sig('MPI_Recv', *_P2P_RECV, _STATUS),
    _sig('MPI_Irecv', *_P2P_RECV, _REQUEST),
    _sig('MPI_Probe', FieldSpec('source', FieldKind.SOURCE), FieldSpec('tag', FieldKind.TAG),
         _comm(), _STATUS),
    _sig('MPI_Sendrecv', _int('sendcount'), _dtype('sendtype'), FieldSpec('dest', FieldKind.DEST),
         FieldSpec('sendtag', FieldKind.TAG), _int('recvcount'), _dtype('recvtype'),
         FieldSpec('source', FieldKind.SOURCE), FieldSpec('recvtag', FieldKind.TAG), _comm(), _STATUS),
    _sig('MPI_Get_count', _STATUS, _dtype(), _int('count')),

    # Completion
    _sig('MPI_Wait', _REQUEST, _STATUS),
    _sig('MPI_Test', _REQUEST, _int('flag'), _STATUS),
    _sig('MPI_Request_free', _REQUEST),
    _sig('MPI_Waitall', _int('count'),
         FieldSpec('requests', FieldKind.REQUEST_ARRAY, length='count'),
         FieldSpec('statuses', FieldKind.STATUS_ARRAY, length='count')),
    _sig('MPI_Waitany', _int('count'),
         FieldSpec('requests', FieldKind.REQUEST_ARRAY, length='count'), _int('index'), _STATUS),
    _sig('MPI_Waitsome', _int('count'),
         FieldSpec('requests', FieldKind.REQUEST_ARRAY, length='count'), _int('outcount'),
         _ints('indices', 'outcount'),
         FieldSpec('statuses', FieldKind.STATUS_ARRAY, length='outcount')),
    _sig('MPI_Testall', _int('count'),
         FieldSpec('requests', FieldKind.REQUEST_ARRAY, length='count'), _int('flag'),
         FieldSpec('statuses', FieldKind.STATUS_ARRAY, length='count')),

    # Collectives
    _sig('MPI_Barrier', _comm()),
    _sig('MPI_Bcast', _int('count'), _dtype(), FieldSpec('root', FieldKind.DEST), _comm()),
    _sig('MPI_Reduce', _int('count'), _dtype(), _sym('op', Category.OP),
         FieldSpec('root', FieldKind.DEST), _comm()),
    _sig('MPI_Allreduce', _int('count'), _dtype(), _sym('op', Category.OP), _comm()),
    _sig('MPI_Gatherv', _int('commrank'), _int('commsize'), _int('sendcount'), _dtype('sendtype'),
         _ints('recvcounts', 'commsize'), _ints('displs', 'commsize'), _dtype('recvtype'),
         FieldSpec('root', FieldKind.DEST), _comm()),
    _sig('MPI_Alltoallv', _int('commsize'), _ints('sendcounts', 'commsize'),
         _ints('senddispls', 'commsize'), _dtype('sendtype'), _ints('recvcounts', 'commsize'),
         _ints('recvdispls', 'commsize'), _dtype('recvtype'), _comm()),

    # Communicators and groups
    _sig('MPI_Comm_size', _comm(), _int('size')),
    _sig('MPI_Comm_rank', _comm(), _int('rank')),
    _sig('MPI_Comm_dup', _comm('oldcomm'), _comm('newcomm')),
    _sig('MPI_Comm_split', _comm('oldcomm'), _int('color'), _int('key'), _comm('newcomm')),
    _sig('MPI_Comm_compare', _comm('comm1'), _comm('comm2'), _sym('result', Category.COMPARISON)),
    _sig('MPI_Comm_free', _comm()),
    _sig('MPI_Comm_group', _comm(), _sym('group', Category.GROUP)),
    _sig('MPI_Group_incl', _sym('group', Category.GROUP), _int('count'), _ints('ranks', 'count'),
         _sym('newgroup', Category.GROUP)),
    _sig('MPI_Group_range_incl', _sym('group', Category.GROUP), _int('count'),
         FieldSpec('ranges', FieldKind.INT_MATRIX, length='count', inner_length=3),
         _sym('newgroup', Category.GROUP)),
    _sig('MPI_Group_free', _sym('group', Category.GROUP)),
    _sig('MPI_Comm_set_errhandler', _comm(), _sym('errhandler', Category.ERRHANDLER)),

    # Topologies
    _sig('MPI_Dims_create', _int('nodes'), _int('ndims'), _ints('dims', 'ndims')),
    _sig('MPI_Cart_create', _comm('oldcomm'), _int('ndim'), _ints('dims', 'ndim'),
         _ints('periods', 'ndim'), _int('reorder'), _comm('newcomm')),
    _sig('MPI_Graph_create', _comm('oldcomm'), _int('nodes'), _ints('index', 'nodes'),
         _int('numedges'), _ints('edges', 'numedges'), _int('reorder'), _comm('newcomm')),
    _sig('MPI_Topo_test', _comm(), _sym('topo', Category.TOPOLOGY)),

    # Attributes and callbacks
    _sig('MPI_Keyval_create', _func('copyfunc'), _func('delfunc'), _sym('key', Category.KEYVAL)),
    _sig('MPI_Comm_create_keyval', _func('copyfunc'), _func('delfunc'),
         _sym('keyval', Category.COMM_KEYVAL)),
    _sig('MPI_Type_create_keyval', _func('copyfunc'), _func('delfunc'),
         _sym('keyval', Category.TYPE_KEYVAL)),
    _sig('MPI_Win_create_keyval', _func('copyfunc'), _func('delfunc'),
         _sym('keyval', Category.WIN_KEYVAL)),
    _sig('MPI_Attr_put', _comm(), _sym('key', Category.KEYVAL)),
    _sig('MPI_Op_create', _func('fptr'), _int('commute'), _sym('op', Category.OP)),
    _sig('MPI_Errhandler_create', _func('function'), _sym('errhandler', Category.ERRHANDLER)),

    # Datatypes
    _sig('MPI_Type_contiguous', _int('count'), _dtype('oldtype'), _dtype('newtype')),
    _sig('MPI_Type_struct', _int('count'), _ints('lengths', 'count'), _ints('indices', 'count'),
         _ints('oldtypes', 'count'), _dtype('newtype')),
    _sig('MPI_Type_create_darray', _int('size'), _int('rank'), _int('ndims'),
         _ints('gsizes', 'ndims'), _ints('distribs', 'ndims'), _ints('dargs', 'ndims'),
         _ints('psizes', 'ndims'), _sym('order', Category.ORDERING), _dtype('oldtype'),
         _dtype('newtype')),
    _sig('MPI_Type_get_envelope', _dtype(), _int('numintegers'), _int('numaddresses'),
         _int('numdatatypes'), _sym('combiner', Category.COMBINER)),
    _sig('MPI_Type_match_size', _sym('typeclass', Category.TYPECLASS), _int('size'), _dtype()),
    _sig('MPI_Type_size', _dtype(), _int('size')),
    _sig('MPI_Type_free', _dtype()),

    # Info objects
    _sig('MPI_Info_create', _sym('info', Category.INFO)),
    _sig('MPI_Info_set', _sym('info', Category.INFO), _str('key'), _str('value')),
    _sig('MPI_Info_free', _sym('info', Category.INFO)),

    # Process management
    _sig('MPI_Comm_spawn', _str('command'),
         FieldSpec('argv', FieldKind.STRING_ARRAY, length=LengthKind.NULLTERM), _int('maxprocs'),
         _sym('info', Category.INFO), FieldSpec('root', FieldKind.DEST), _comm('oldcomm'),
         _comm('intercomm'), _ints('errcodes', 'maxprocs')),
    _sig('MPI_Comm_spawn_multiple', _int('totprocs'), _int('count'),
         FieldSpec('commands', FieldKind.STRING_ARRAY, length='count'),
         FieldSpec('argvs', FieldKind.STRING_MATRIX, length='count', inner_length=LengthKind.NULLTERM),
         _ints('maxprocs', 'count'), _ints('info', 'count'), FieldSpec('root', FieldKind.DEST),
         _comm(), _comm('intercomm'), _ints('errcodes', 'totprocs')),

    # One-sided
    _sig('MPI_Win_create', _int64('size'), _int('dispunit'), _sym('info', Category.INFO), _comm(),
         _sym('win', Category.WIN)),
    _sig('MPI_Win_fence', _sym('assertion', Category.WIN_ASSERT), _sym('win', Category.WIN)),
    _sig('MPI_Win_lock', _sym('locktype', Category.LOCKTYPE), _int('winrank'),
         _sym('assertion', Category.WIN_ASSERT), _sym('win', Category.WIN)),
    _sig('MPI_Win_unlock', _int('winrank'), _sym('win', Category.WIN)),
    _sig('MPI_Put', _int('origincount'), _dtype('origintype'), _int('targetrank'),
         _int64('targetdisp'), _int('targetcount'), _dtype('targettype'), _sym('win', Category.WIN)),
    _sig('MPI_Win_free', _sym('win', Category.WIN)),

    # MPI-IO
    _sig('MPI_File_open', _comm(), FieldSpec('filename', FieldKind.STRING_ARRAY, length=LengthKind.CSTRING),
         _sym('amode', Category.FILEMODE), _sym('info', Category.INFO), _sym('file', Category.FILE)),
    _sig('MPI_File_close', _sym('file', Category.FILE)),
    _sig('MPI_File_seek', _sym('file', Category.FILE), _int64('offset'), _sym('whence', Category.WHENCE)),
    _sig('MPI_File_set_view', _sym('file', Category.FILE), _int64('offset'), _dtype('hosttype'),
         _dtype('filetype'), _str('datarep'), _sym('info', Category.INFO)),
    _sig('MPI_File_write', _sym('file', Category.FILE), _int('count'), _dtype(), _STATUS),
    _sig('MPI_File_read_at', _sym('file', Category.FILE), _int64('offset'), _int('count'), _dtype(),
         _STATUS),
    _sig('MPIO_Wait', _REQUEST, _STATUS),
    _sig('MPI_File_iwrite', _sym('file', Category.FILE), _int('count'), _dtype(), _REQUEST),
]


SIGNATURES: Dict[str, CallSignature] = {sig.name: sig for sig in _CATALOGUE}


def get_signature(name: str) -> CallSignature:
    """
    Look up a call's signature.

    Raises:
        UnknownCallError: If no signature is registered under the name
    """
    try:
        return SIGNATURES[name]
    except KeyError:
        raise UnknownCallError(ConversionError(
            code=ErrorCode.E1002_UNKNOWN_CALL,
            context={'call': name},
        )) from None
