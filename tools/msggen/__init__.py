"""
msggen: IPC message header generator.

Turns a YAML message schema into a C header holding the message structs and
an ordered ``ipc_<port>_msg_t`` enum of message tags.
"""
