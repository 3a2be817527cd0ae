# *-* coding: utf-8 *-*
from smimeverdict import constants
from smimeverdict.mime import ParsedMessage


def envelope_problems(message: ParsedMessage) -> list:
    """
    Check the message against the multipart/signed layout.

    :param message: Parsed message.
    :return: List of human readable problems, empty for a well formed envelope.
    """
    problems = []
    root = message.root
    if root.content_type != constants.ROOT_NODE_CONTENT_TYPE:
        problems.append('root content type is %s' % root.content_type)
    protocol = root.params.get('protocol')
    if protocol != constants.ROOT_NODE_PROTOCOL:
        problems.append('protocol parameter is %r' % protocol)
    micalg = root.params.get('micalg')
    if micalg is None or micalg.lower() not in constants.MESSAGE_INTEGRITY_CHECK_ALGORITHMS:
        problems.append('micalg parameter is %r' % micalg)
    if not root.children:
        problems.append('root node has no child nodes')
    signature = message.get_node(constants.SIGNATURE_NODE)
    if signature is None:
        problems.append('signature node is missing')
    elif signature.content_type not in constants.SIGNATURE_NODE_CONTENT_TYPES:
        problems.append('signature node content type is %s' % signature.content_type)
    return problems


def is_signed_envelope(message: ParsedMessage) -> bool:
    return not envelope_problems(message)
