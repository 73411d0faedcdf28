"""
ProjectHub Backend — Document Models
=====================================

What:  Collection names, document factories and document → record converters.
How:   MongoDB is schema-flexible, so the "model" of each entity is the
       factory that builds a new document plus the converter that turns a
       stored document into a plain JSON-ready dict (ObjectId → str).

Stored shapes:
    users:    {_id, username, email, firstName, lastName, bio, hashedPassword, createdAt, updatedAt}
    projects: {_id, name, description, github, technologies, deploymentLink,
               owner: {id, username}, likes: [userId], savedBy: [userId],
               comments: [commentId], createdAt, updatedAt}
    comments: {_id, comment, projectId, owner: {id, username}, createdAt}
"""
