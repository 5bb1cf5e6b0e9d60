def get_schema():
    # Order matters: referenced tables come first.
    return {
        'users': """
            CREATE TABLE IF NOT EXISTS users (
                id CHAR(36) PRIMARY KEY,
                name VARCHAR(100),
                email VARCHAR(255) UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                created_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6),
                updated_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6) ON UPDATE CURRENT_TIMESTAMP(6)
            ) ENGINE=InnoDB
        """,
        'businesses': """
            CREATE TABLE IF NOT EXISTS businesses (
                id CHAR(36) PRIMARY KEY,
                name VARCHAR(255) NOT NULL,
                field VARCHAR(255) NOT NULL,
                description TEXT,
                color_palette TEXT,
                owner_id CHAR(36) NOT NULL,
                created_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6),
                updated_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6) ON UPDATE CURRENT_TIMESTAMP(6),
                INDEX idx_businesses_owner (owner_id),
                FOREIGN KEY (owner_id) REFERENCES users(id) ON DELETE CASCADE
            ) ENGINE=InnoDB
        """,
        'media_files': """
            CREATE TABLE IF NOT EXISTS media_files (
                id CHAR(36) PRIMARY KEY,
                url TEXT NOT NULL,
                type VARCHAR(50) NOT NULL,
                owner_id CHAR(36) NOT NULL,
                business_id CHAR(36),
                created_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6),
                INDEX idx_media_owner (owner_id),
                INDEX idx_media_business (business_id),
                FOREIGN KEY (owner_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (business_id) REFERENCES businesses(id) ON DELETE CASCADE
            ) ENGINE=InnoDB
        """,
        'marketing_plans': """
            CREATE TABLE IF NOT EXISTS marketing_plans (
                id CHAR(36) PRIMARY KEY,
                content LONGTEXT NOT NULL,
                owner_id CHAR(36) NOT NULL,
                business_id CHAR(36) NOT NULL,
                created_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6),
                updated_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6) ON UPDATE CURRENT_TIMESTAMP(6),
                INDEX idx_plans_owner (owner_id),
                FOREIGN KEY (owner_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (business_id) REFERENCES businesses(id) ON DELETE CASCADE
            ) ENGINE=InnoDB
        """,
        'conversations': """
            CREATE TABLE IF NOT EXISTS conversations (
                id CHAR(36) PRIMARY KEY,
                prompt_content LONGTEXT NOT NULL,
                response_content LONGTEXT NOT NULL,
                owner_id CHAR(36) NOT NULL,
                business_id CHAR(36) NOT NULL,
                created_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6),
                INDEX idx_conversations_owner (owner_id),
                FOREIGN KEY (owner_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (business_id) REFERENCES businesses(id) ON DELETE CASCADE
            ) ENGINE=InnoDB
        """
    }
